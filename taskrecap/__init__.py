"""
taskrecap
Todoist completion analytics: daily counts, project shares, hour rhythm, streaks and recap
"""

__version__ = "0.1.0"
