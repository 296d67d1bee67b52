"""
featweaver - Feat Spell Generator

Reads feats from game and mod packages, merges module versions into a load
order, and weaves every feat's selector choices into generated spells,
boosts and a spell wiring file.
"""

__version__ = "0.1.0"
__author__ = "featweaver contributors"

from featweaver.parser import parse_selector, parse_selector_list
from featweaver.resolver import merge, LoadOrderError
from featweaver.weaver import FeatWeaver, BuildContext
