"""Domain model for a fruit gift-economy simulation game: fruit, bags, members, communities, an event log, luck rules and async storage services over abstract repositories."""

__version__ = "0.1.0"