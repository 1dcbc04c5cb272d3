"""Small shared value types."""

# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()
