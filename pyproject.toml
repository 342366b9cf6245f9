[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treceval_measures"
version = "9.0.4"
description = "Retrieval evaluation measures over ranked results: precision, MAP, nDCG, bpref, graded and preference measures, and z-score reference data."
requires-python = ">=3.10"
dependencies = []
keywords = ["information retrieval", "evaluation", "trec", "map", "ndcg", "bpref", "precision"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["treceval_measures"]

[tool.pytest.ini_options]
addopts = "-ra"
