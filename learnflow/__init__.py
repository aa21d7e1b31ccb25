"""
Learnflow - flashcard study tool with Leitner scheduling and quizzes.
"""

__version__ = "1.0.0"
