# Statuses
STATUS_NOT_STARTED = "Not Started"
STATUS_PLANNED = "Planned"
STATUS_BACKLOG = "Backlog"
STATUS_IN_PROGRESS = "In Progress"
STATUS_IN_REVIEW = "In Review"
STATUS_ON_HOLD = "On Hold"
STATUS_DONE = "Done"
STATUS_CANCELLED = "Cancelled"

DEFAULT_STATUS = STATUS_NOT_STARTED

# Badge classes per status (background, text, border)
STATUS_STYLES = {
    STATUS_NOT_STARTED: ("bg-gray-100", "text-gray-800", "border-gray-200"),
    STATUS_PLANNED: ("bg-indigo-100", "text-indigo-800", "border-indigo-200"),
    STATUS_BACKLOG: ("bg-purple-100", "text-purple-800", "border-purple-200"),
    STATUS_IN_PROGRESS: ("bg-blue-100", "text-blue-800", "border-blue-200"),
    STATUS_IN_REVIEW: ("bg-yellow-100", "text-yellow-800", "border-yellow-200"),
    STATUS_ON_HOLD: ("bg-red-100", "text-red-800", "border-red-200"),
    STATUS_DONE: ("bg-green-100", "text-green-800", "border-green-200"),
    STATUS_CANCELLED: ("bg-gray-100", "text-gray-800 line-through", "border-gray-200"),
}

STATUS_STYLE_FALLBACK = ("bg-gray-100", "text-gray-800", "border-gray-200")

# Substrings that mark a property as holding images (matched on the name)
IMAGE_NAME_MARKERS = ("image", "screenshot", "snapshot", "cover", "thumbnail")

# Notion caps database queries at 100 rows per request
PAGE_SIZE = 100

# Placeholders
UNTITLED = "Untitled"
EMPTY_VALUE = "—"
