"""
Web API package for the blind chess engine.

Provides a FastAPI JSON API that front ends (board UI, speech shell) call to
get engine moves and move announcements for a position.
"""
