# Routes package init
"""
Commander Backend — API Routes Package
======================================

Route Inventory:
    - commands.py:  /api/commands          (list, create)
                    /api/commands/{id}     (get, put, patch, delete)
    - health.py:    GET /health            (service health check)

Routes stay thin: they extract the request data, call CommandService and
set status codes and headers. The logic lives in services/.
"""
