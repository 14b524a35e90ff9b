"""gradlelock — keep Gradle dependency lock files in step with the resolved graph."""

__version__ = "0.1.0"
