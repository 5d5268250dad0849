from datetime import datetime, timezone

# Date par défaut quand qappctl omet ctime: 0001-01-01T00:00:00Z
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
