# Services package init
"""
Commander Backend — Services Layer
==================================

What:  The logic between routes (HTTP) and repositories (persistence).

Service Inventory:
    - CommandService: list/get/create/update/patch/delete of commands,
      including JSON Patch application and validation
"""
