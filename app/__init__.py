"""CreatorPulse backend"""
