"""Click processing helpers.

Every click flows through the same validator pipeline so rejected input shows up consistently in logs.
"""
