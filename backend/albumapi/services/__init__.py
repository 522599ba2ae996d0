# Services package init
"""
Album API — Services Layer
===========================

What:  Logic sitting between routes (HTTP) and the Airtable backend.

Service Inventory:
    - TableBackend (abstract): Interface for the remote record store
    - AirtableTable: Concrete implementation over the Airtable REST API (httpx)
    - record_mapper: Field coercion and field map ⇄ Album translation
    - AlbumService: The Store; list / get / create, one backend call each
"""
