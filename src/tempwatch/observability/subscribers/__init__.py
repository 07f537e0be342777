"""Subscribers that route tempwatch events to logs, files, and alert sinks."""
