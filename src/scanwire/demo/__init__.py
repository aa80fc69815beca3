"""Example components wired together by scanning this package."""
