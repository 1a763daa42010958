"""Book loading from source directories and render contexts."""

from booklinkcheck.book.loader import load_book_dir, load_render_context, read_render_context

__all__ = ["load_book_dir", "load_render_context", "read_render_context"]
