"""
gsheet-gamedata: Google Sheets game data -> JSON + Cocos Creator TypeScript
"""

__version__ = "0.1.0"
