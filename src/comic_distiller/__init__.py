"""Comic Distiller: convert comic-book archives into EPUB documents."""

__version__ = "0.1.0"
