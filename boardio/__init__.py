"""Board snapshots: file I/O, preset layouts, rendering and text reports."""
