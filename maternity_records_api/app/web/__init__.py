"""
HTML surface of the data‑entry workflow.

Form posts are form‑encoded and answered with ``303 See Other``
redirects, so the browser walks from one service form to the next with
the personal number in the query string.
"""
