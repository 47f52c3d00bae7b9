from setuptools import setup, find_packages


setup(
    name="promptbot",
    version="0.1.0",
    description="Counter echo chat bot with a confirmed reset prompt",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.6",
        "pydantic-settings>=2.7",
        "typer>=0.12",
        "apscheduler>=3.10,<4",
    ],
    extras_require={
        "web": [
            "fastapi>=0.111.0",
            "uvicorn[standard]>=0.30.0",
        ],
        "test": [
            "pytest>=8.0",
            "httpx>=0.27",
            "fastapi>=0.111.0",
            "uvicorn[standard]>=0.30.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "promptbot=promptbot.cli:app",
            "promptbot-web=promptbot.web_server:main",
        ]
    },
    python_requires=">=3.11",
)
