"""Core habit tracking services: clock, day queries, progress, navigation, onboarding, streaks."""
