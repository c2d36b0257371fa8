"""
Triad core Python package.

Pure game logic for a two-player Triple Triad style card game on a 3x3 grid.
Every value is immutable; the rules engine returns a new Game per command.
Modules:
- card.py: Card, card and deck generation, CardGenerator capabilities
- board.py: Board, Coord, text rendering
- player.py: Player
- commands.py: Register, SelectCard, Play, ChoosePlayer, Check
- state.py: game phases and the Game aggregate
- rules.py: Rules, RulesImpl, execute
- cli.py: console hot-seat driver
"""
