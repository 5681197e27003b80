#!/usr/bin/env python3
"""
Main entry point for the Twitch Plays chat bot
"""

from tppbot.main import run

if __name__ == "__main__":
    run()
