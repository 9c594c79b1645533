"""
Interface package: communication protocols for the tiered chess engine.

Modules:
    uci - Universal Chess Interface (UCI) protocol handler.
          Reads commands from stdin, writes responses to stdout.
          Run with: python -m interface.uci (or the tierchess-uci script)
"""
