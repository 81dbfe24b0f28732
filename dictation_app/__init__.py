"""
Dictation trainer: practice typing sentences from your own audio clips.
"""
