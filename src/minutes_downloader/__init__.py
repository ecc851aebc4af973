"""Download the PDF attachments of a WordPress minutes feed."""

__version__ = "0.1.0"
