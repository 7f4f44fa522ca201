"""
Maze Module - grid, seeded generation and difficulty profiles
"""
