"""
Allocation Tree HTTP API (FastAPI)

HTTP surface over the allocation engine:
- POST /upload - Build and publish a tree from an address,amount CSV
- GET /root - Root metadata of the published tree
- GET /results, /results/csv - Entries with proofs
- GET /proof/{address} - Proof for one address
- GET /merkle.json - Complete snapshot
- GET /template - Sample CSV
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
