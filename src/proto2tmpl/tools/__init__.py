"""Command-line helpers that run proto2tmpl outside of protoc."""
