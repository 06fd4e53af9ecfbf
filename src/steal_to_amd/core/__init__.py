"""
Core conversion pipeline: parse, locate, rewrite, print, touch up.
"""
