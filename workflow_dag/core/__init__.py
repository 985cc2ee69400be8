"""
Settings and logging shared by the command line tooling.
"""
