"""
Dotdash core: the Morse codec plus the plumbing every surface shares
(errors, defaults, env loading, tool helpers, metrics, health).
"""
