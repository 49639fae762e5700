"""FitPlan API: workout and meal planning with progress tracking and achievements."""

__version__ = "0.1.0"
