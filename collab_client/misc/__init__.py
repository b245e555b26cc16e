"""
Collab client miscellaneous helpers
"""
