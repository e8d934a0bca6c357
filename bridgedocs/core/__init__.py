"""Shared configuration, paths, access gate and document state."""
