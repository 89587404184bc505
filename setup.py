from setuptools import setup, find_packages

setup(
    name="pauliprop",
    version="0.1.0",
    description="Heisenberg-picture Pauli propagation with truncation",
    package_dir={"": "pauli_pkg"},
    packages=find_packages("pauli_pkg", exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "qiskit",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
)
