#!/usr/bin/env python3
"""
Thoughtscan module entry point
Allows running: python3 -m thoughtscan
"""

if __name__ == '__main__':
    from thoughtscan.cli import main
    main()
