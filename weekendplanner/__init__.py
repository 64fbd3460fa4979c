"""
weekendplanner: find a day, a movie and a dinner table that suit everyone.
"""
