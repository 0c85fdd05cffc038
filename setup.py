from setuptools import setup, find_packages

setup(
    name="discord-dungeon",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "discord_dungeon": ["config/example.json"],
    },
    install_requires=[
        "discord.py>=2.0",
        "Flask",
        "Flask-SQLAlchemy>=3.0",
        "SQLAlchemy>=1.4",
        "colorama",
        "requests",
        "mysql-connector-python",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "discord-dungeon=discord_dungeon.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
