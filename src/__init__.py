"""careerai: resume scoring, AI feedback normalization, caching and usage metering."""
