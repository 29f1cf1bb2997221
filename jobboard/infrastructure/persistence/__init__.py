"""Persistence: SQLAlchemy models, repositories, transactions, migrations."""
