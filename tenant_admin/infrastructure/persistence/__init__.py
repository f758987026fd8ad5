"""Persistence: async engine, models, repositories."""
