"""
Tic-tac-toe game arena: in-memory game sessions, rule engine and AI opponent.
"""
