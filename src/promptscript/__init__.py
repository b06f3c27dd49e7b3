"""
Scriptable bash/zsh prompt renderer

``promptscript`` renders a command prompt from a template written in Python.
The template builds the prompt out of primitives for the current user, host,
directory, and Git branch, and colors parts of it with nestable color blocks.

Features:

- Finds the current Git repository (including worktrees & submodules) and
  branch by reading the repository metadata directly, without running ``git``
- Nested colors are restored correctly when an inner block ends
- Escape sequences are marked as zero-width for Bash and zsh so that line
  wrapping is not thrown off
- Primitives are evaluated lazily, so a prompt only pays for what it shows
"""

__version__ = "0.1.0"
__license__ = "MIT"
