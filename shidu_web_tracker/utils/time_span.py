def format_time_span(duration_ms) -> str:
    """
    Render a duration in milliseconds as HH:MM:SS.

    Hours are not wrapped at 24 and grow past two digits for very long spans.
    """
    ms = int(duration_ms // 1)
    if ms < 0:
        raise ValueError(f"duration must be non-negative, got {duration_ms}")
    hrs = ms // 3_600_000
    mins = (ms % 3_600_000) // 60_000
    secs = (ms % 60_000) // 1000
    return f"{hrs:02d}:{mins:02d}:{secs:02d}"
