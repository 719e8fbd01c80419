"""termsuggest - shell-level completion discovery for terminal suggestion engines.

Queries an interactive shell for its aliases and builtin commands, enriches
builtins with descriptions from a static snapshot and hands back a normalized
list of completion resources. The shell is driven through asyncio subprocesses.
"""
