"""Blog vocabulary."""

BLOG_CATEGORIES = ("diabetes", "nutrition", "lifestyle", "exercise", "mental-health")
BLOG_STATUSES = ("draft", "published", "archived")

MAX_TAGS = 10
