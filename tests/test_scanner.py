"""
Tests for the bounded directory scanner
"""
import os

import pytest

from thoughtscan.core.scanner import DirectoryScanner


def touch(path, content=''):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestDirectoryScanner:
    """File collection under src/, assets/js/ and scripts/"""

    def test_file_cap(self, tmp_path):
        """150 candidate files are cut to the first 100"""
        for i in range(150):
            touch(tmp_path / 'src' / f'f{i:03d}.js')

        files = DirectoryScanner(tmp_path).scan()

        assert len(files) == 100
        assert files[0].name == 'f000.js'
        assert files[-1].name == 'f099.js'

    def test_cap_spans_roots(self, tmp_path):
        for i in range(80):
            touch(tmp_path / 'src' / f'a{i:02d}.js')
        for i in range(80):
            touch(tmp_path / 'scripts' / f'b{i:02d}.js')

        files = DirectoryScanner(tmp_path).scan()

        assert len(files) == 100
        assert sum(1 for f in files if f.parent.name == 'scripts') == 20

    def test_root_order(self, tmp_path):
        touch(tmp_path / 'scripts' / 'build.js')
        touch(tmp_path / 'assets' / 'js' / 'widget.jsx')
        touch(tmp_path / 'src' / 'index.ts')

        files = DirectoryScanner(tmp_path).scan()
        assert [f.name for f in files] == ['index.ts', 'widget.jsx', 'build.js']

    def test_extension_filter(self, tmp_path):
        for name in ('a.js', 'b.jsx', 'c.ts', 'd.tsx', 'e.py', 'README.md', 'f.json'):
            touch(tmp_path / 'src' / name)

        names = sorted(f.name for f in DirectoryScanner(tmp_path).scan())
        assert names == ['a.js', 'b.jsx', 'c.ts', 'd.tsx']

    def test_skips_node_modules_and_dot_dirs(self, tmp_path):
        touch(tmp_path / 'src' / 'node_modules' / 'lib' / 'index.js')
        touch(tmp_path / 'src' / '.cache' / 'bundle.js')
        touch(tmp_path / 'src' / '.hidden.js')
        touch(tmp_path / 'src' / 'app.js')

        files = DirectoryScanner(tmp_path).scan()
        assert [f.name for f in files] == ['app.js']

    def test_depth_limit(self, tmp_path):
        """Directories deeper than max_depth are not entered"""
        directory = tmp_path / 'src'
        for level in range(13):
            touch(directory / f'level{level}.js')
            directory = directory / f'd{level + 1}'

        files = DirectoryScanner(tmp_path).scan()

        assert len(files) == 11
        assert 'level10.js' in {f.name for f in files}
        assert 'level11.js' not in {f.name for f in files}

    def test_custom_depth(self, tmp_path):
        touch(tmp_path / 'src' / 'top.js')
        touch(tmp_path / 'src' / 'nested' / 'deep.js')

        files = DirectoryScanner(tmp_path, max_depth=0).scan()
        assert [f.name for f in files] == ['top.js']

    def test_missing_roots_recorded(self, tmp_path):
        (tmp_path / 'src').mkdir()

        scanner = DirectoryScanner(tmp_path)
        assert scanner.scan() == []
        assert scanner.missing_roots == ['assets/js', 'scripts']
        assert scanner.suppressed_errors == []

    def test_unlistable_directory_suppressed(self, tmp_path, monkeypatch):
        touch(tmp_path / 'src' / 'ok.js')
        locked = tmp_path / 'src' / 'locked'
        touch(locked / 'secret.js')

        real_scandir = os.scandir

        def fake_scandir(path):
            if os.fspath(path) == os.fspath(locked):
                raise PermissionError(13, 'Permission denied')
            return real_scandir(path)

        monkeypatch.setattr('thoughtscan.core.scanner.os.scandir', fake_scandir)

        scanner = DirectoryScanner(tmp_path)
        files = scanner.scan()

        assert [f.name for f in files] == ['ok.js']
        assert len(scanner.suppressed_errors) == 1
        error = scanner.suppressed_errors[0]
        assert error.operation == 'scan'
        assert error.path == str(locked)
        assert error.message == 'Permission denied'

    def test_from_config(self, tmp_path):
        from thoughtscan.config import ThoughtscanConfig

        config = ThoughtscanConfig()
        config.scan_roots = ['lib']
        config.max_files = 2
        for name in ('a.js', 'b.js', 'c.js'):
            touch(tmp_path / 'lib' / name)

        files = DirectoryScanner.from_config(config, tmp_path).scan()
        assert [f.name for f in files] == ['a.js', 'b.js']


class TestReadSource:
    """Reading file content"""

    def test_reads_utf8_ignoring_bad_bytes(self, tmp_path):
        path = tmp_path / 'a.js'
        path.write_bytes(b'const a = 1;\xff\n')

        assert DirectoryScanner(tmp_path).read_source(path) == 'const a = 1;\n'

    @pytest.mark.parametrize('make_target', [
        lambda p: p / 'missing.js',
        lambda p: p,
    ])
    def test_unreadable_returns_none(self, tmp_path, make_target):
        scanner = DirectoryScanner(tmp_path)
        target = make_target(tmp_path)

        assert scanner.read_source(target) is None
        assert scanner.suppressed_errors[0].operation == 'read'
