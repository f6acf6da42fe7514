"""Rules shipped with repohint and enabled by default."""
