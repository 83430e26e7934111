"""Terminal front end: terminal I/O, widgets and the editor loop."""
