# Routes package init
"""
Album API — API Routes Package
===============================

Route Inventory:
    - albums.py:  GET  /albums             (list albums)
                  GET  /albums/{album_id}  (get one album)
                  POST /albums             (create an album)
    - health.py:  GET  /health             (liveness check)

Routes are thin: they extract request data, call AlbumService, and let the
global exception handlers format errors.
"""
