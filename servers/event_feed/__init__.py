"""
Event Feed

Collects upcoming events for a topic keyword from event-listing providers:
- Eventbrite (paged search, venues looked up by id)
- Meetup (offset-paged open events, venues embedded)

Every provider yields a flat list of canonical Event records. Merging the
per-provider lists is left to the caller.
"""

__version__ = "1.0.0"
