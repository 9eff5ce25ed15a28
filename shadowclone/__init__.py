"""Shadow Clone Escape: survive a maze while clones replay your own moves."""
