# moderation/engine/__init__.py

"""Engine package providing the off-platform detector and its recognizers.

This package contains the Presidio pattern recognizers compiled from the
rule catalogue and the detector that evaluates them in order.
"""
