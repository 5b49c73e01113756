"""Admin backend for online exams."""

__version__ = "1.0.0"
