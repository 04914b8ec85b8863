"""
One-off maintenance commands, run with `python -m digihomes.scripts.<name>`.
"""
