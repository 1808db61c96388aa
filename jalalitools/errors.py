"""Exceptions raised by jalalitools."""

from __future__ import annotations

import click


class InvalidDateError(click.ClickException):
    """A date or time value could not be parsed or is out of range."""


class ConfigurationError(click.ClickException):
    """An environment setting holds a value that cannot be used."""
