"""
VimpyType - Modal editor navigation trainer.

Teaches modal-editor motions through three kinds of training session:

1. Lesson    - Guided, one key per step, filtered by difficulty
2. Drill     - Random keys from the chosen key set, scored
3. Challenge - Multi-key sequences with accepted alternatives

Packages:
- core: Key tokens, difficulty key sets, timer scheduling
- editor: The simulated modal text buffer
- training: Key-sequence recognizer and session controllers
- cli: Terminal host (typer + rich)
"""

__version__ = "1.0.0"
