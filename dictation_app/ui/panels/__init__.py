"""
Panels for the dictation trainer UI.
"""
