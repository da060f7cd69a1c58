"""
quadsolve: recover the constant term of a quadratic from base-encoded samples.

Layout:
  - core:    point types and test-case JSON IO
  - solver:  base decoder and Cramer's-rule coefficient solver
  - runners: kernel pipeline, diagnostics and the command-line runner
"""
