"""podtato-head server.

One process, three roles picked at launch:
 - ``all``: monolith that renders the home page and serves every body part
 - ``frontend``: renders the home page from five remote part services
 - ``<part-name>``: leaf service answering for a single body part

Aggregating roles tolerate any subset of unreachable peers: a missing part is
simply left off the page.
"""

__version__ = "0.1.0"

BODY_PARTS = ("left-arm", "right-arm", "left-leg", "right-leg", "hat")
