"""Application constants that never change across environments.

User-facing strings and document field names are fixed here so the
controller, the views and the stores agree on them.
"""

# ===== Document Fields =====
FIELD_NAME = "name"
FIELD_PROVINCE = "province"

# ===== List Positions =====
INVALID_POSITION = -1

# ===== Chooser Options =====
OPTION_EDIT = "Edit"
OPTION_DELETE = "Delete"
CITY_OPTIONS = (OPTION_EDIT, OPTION_DELETE)

# ===== Dialog Text =====
DIALOG_TAG_ADD = "Add City"
DIALOG_TAG_EDIT = "City Details"
DELETE_DIALOG_TITLE = "Delete City"
DELETE_BUTTON_LABEL = "Delete"

# ===== Toast Messages =====
MSG_EMPTY_CITY_NAME = "City name cannot be empty"
MSG_CITY_DELETED = "Deleted: {name}"
MSG_DELETE_PROMPT = "Delete {name} ({province})?"
