"""
SDD Chat Proxy - fonction edge qui relaie le widget de chat vers DeepSeek.
"""

__version__ = "1.0.0"
