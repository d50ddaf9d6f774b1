from setuptools import setup, find_packages

setup(
    name="sp500-volatility",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config", "models", "analyze_volatility"],
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "arch",
        "statsmodels",
        "pmdarima",
        "yfinance",
        "matplotlib",
        "seaborn",
        "tqdm",
        "psutil",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "analyze-volatility=analyze_volatility:main",
        ],
    },
    python_requires=">=3.8",
)
