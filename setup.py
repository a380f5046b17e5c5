from setuptools import setup, find_packages

setup(
    name="bp-cli",
    version="0.1.0",
    description="Command line administration for BuddyPress groups, profile fields and emails",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=["InquirerPy", "tqdm", "PyYAML", "loguru"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "bp=bp_cli.__main__:main",
        ]
    },
)
