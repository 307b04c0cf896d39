"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_FAMILY_ID_PREFIX = "BCC/24344/"
FAMILY_ID_DIGITS = 5

NIC_MIN_LENGTH = 10
ADMISSION_NUMBER_PATTERN = r"[0-9]{5}"

# Well-known storage keys for the registry snapshot.
FAMILIES_KEY = "bcc-families"
NEXT_FAMILY_ID_KEY = "bcc-next-family-id"
# Flask session key set while a browser is logged in.
AUTHENTICATED_KEY = "bcc-authenticated"

CLASS_OPTIONS = (
    "1A", "1B", "1C", "1D", "1E",
    "2A", "2B", "2C", "2D", "2E",
    "3A", "3B", "3C", "3D", "3E",
    "4A", "4B", "4C", "4D", "4E",
    "5A", "5B", "5C", "5D", "5E",
    "6A", "6B", "6C", "6D", "6E", "6F",
    "7A", "7B", "7C", "7D", "7E", "7F",
    "8A", "8B", "8C", "8D", "8E", "8F",
    "9A", "9B", "9C", "9D", "9E", "9F",
    "10A", "10B", "10C", "10D", "10E", "10F", "10G",
    "11A", "11B", "11C", "11D", "11E", "11F", "11G", "11H",
    "12 Arts", "13 Arts", "12 Com", "13 Com", "12 Tech", "13 Tech",
    "12 Bio", "13 Bio", "12 Maths", "13 Maths",
)
