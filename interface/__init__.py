"""
Interface package: ways for a person to play against the engine.

Modules:
    trainer — Console blind chess trainer.
              Reads moves and commands from stdin, announces moves on stdout.
              Can be run as a module: python -m interface.trainer
"""
