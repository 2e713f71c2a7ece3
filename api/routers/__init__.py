"""
API Routers - HTTP endpoint handlers

Each router handles a specific domain of functionality:
- recommendations: LLM-driven recommendations for the viewer's context
- movies: catalog search and enriched movie details
- ask: free-form questions relayed to the completion model
- health: health checks and upstream configuration info
"""
