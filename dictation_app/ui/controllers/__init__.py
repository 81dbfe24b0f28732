"""
Controllers for the dictation trainer UI.
"""
