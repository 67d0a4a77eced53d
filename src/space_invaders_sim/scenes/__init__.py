"""
Space Invaders scenes
"""
