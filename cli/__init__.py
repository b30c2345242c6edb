"""Command-line front end for :mod:`karate_action` (see ``karate_cli.py``)."""
