"""
Game Module - session, phases, questions and results
"""
