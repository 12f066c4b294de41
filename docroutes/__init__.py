"""
Docroutes: static documentation routes from a declaration store.

Docroutes reads a handle-addressed declaration store and produces one
route per documented declaration, enabling you to:
- Resolve alias chains to the declarations they stand for
- Assemble page data shaped by each declaration's category
- Enumerate every route of every module, with an on-disk cache

Usage:
    from docroutes.core import DocRoutesConfig, DocSession

    config = DocRoutesConfig(project_root=Path("."))
    with DocSession(config) as session:
        routes = session.generate_routes()
"""

__version__ = "0.1.0"
