"""Territory game admin core: repositories, joins and maintenance workflows."""

__version__ = "0.1.0"
