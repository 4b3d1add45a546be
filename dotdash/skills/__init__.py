"""Dict-in/dict-out tools wrapping the codec."""
