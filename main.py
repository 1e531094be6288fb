#!/usr/bin/env python3
"""
Main entry point for ircconnect
"""

from ircconnect.main import run

if __name__ == "__main__":
    run()
