from setuptools import setup, find_packages

setup(
    name="csp-sudoku",
    version="1.0.0",
    description="9x9 Sudoku solver using CSP backtracking with MRV, Degree Heuristic and forward checking",
    author="robomotic",
    packages=find_packages(include=["csp_sudoku", "csp_sudoku.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.6.0",
        "seaborn>=0.11.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "csp-sudoku=csp_sudoku.cli:main",
        ],
    },
)
