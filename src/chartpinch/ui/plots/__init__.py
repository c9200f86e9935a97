"""Plot backends for pinch-zoomable charts."""
