"""GeckoTrack: study submissions, gamification points and check-ins."""

__version__ = "0.1.0"
