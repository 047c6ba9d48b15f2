"""
tictac core Python package.

This package contains the game-state engine for two-player timed tic-tac-toe
and the pure-logic helpers it is built from, kept free of any drawing or
transport concerns so hosts (Flask app, terminal CLI) stay thin.
Modules:
- errors.py: TicTacError and the id, move and round-state errors
- grid.py: Grid, Coord, pointer-to-cell mapping
- player.py: PlayerRecord
- state.py: RoundState
- rules.py: move validation, win and draw detection
- clock.py: countdown tickers (threaded and manual)
- engine.py: RoundEngine, RoundSnapshot, RoundOutcome
- render.py: text rendering of grid, clock and outcomes
- session.py: GameSession, thread-safe host wrapper
- config.py: Config read from environment variables
- cli.py: terminal two-player game
"""
