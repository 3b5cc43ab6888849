from setuptools import setup, find_packages

setup(
    name="ArtGraph",
    version="1.0.0",
    description="ArtGraph API - Neo4j-backed image analysis graph server",
    packages=find_packages(include=["ArtGraph", "ArtGraph.*", "api"]),
    install_requires=[
        "neo4j==6.0.3",
        "fastapi==0.115.6",
        "uvicorn==0.34.0",
        "pydantic==2.10.4",
        "rich==13.9.4",
        "PyYAML==6.0.2",
        "python-dotenv==1.0.1",
    ],
    extras_require={
        "test": [
            "pytest==8.3.4",
            "httpx==0.28.1",
        ],
    },
    python_requires='>=3.11',
    author="ArtGraph Team",
)
