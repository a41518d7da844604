"""Storage core of a small relational database: typed fields, columns, schemas, rows, buffer replacers, a reader-writer latch, a result writer and log-based recovery."""

__version__ = "2022.7.0"