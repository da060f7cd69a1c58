"""Runners that wire test-case files through the decoder and solver."""
