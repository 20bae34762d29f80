from datetime import date, datetime

from sqlalchemy import String, TypeDecorator


class DateTime(TypeDecorator):
    """Custom type for handling datetime objects stored as ISO format strings"""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert datetime to ISO format string for storage"""
        if value is not None:
            if isinstance(value, datetime):
                return value.isoformat()
            if isinstance(value, date):
                return datetime(value.year, value.month, value.day).isoformat()
            # If already a string, pass it through
            return value
        return None

    def process_result_value(self, value, dialect):
        """Convert ISO format string back to datetime object"""
        if value is not None:
            if isinstance(value, str):
                return datetime.fromisoformat(value)
            return value
        return None
