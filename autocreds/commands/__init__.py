"""
Commands exposed by the command-line interface.
"""

from .setup import SetupOptions, SetupAnswers, SetupWizard, setup_command

__all__ = [
    'SetupOptions',
    'SetupAnswers',
    'SetupWizard',
    'setup_command',
]
