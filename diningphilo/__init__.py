"""Threaded simulation of the dining philosophers problem, with the philo command."""

__version__ = "0.1.0"

__all__ = ["__version__"]