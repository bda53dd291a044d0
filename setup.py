# Copyright (c) 2013-2025 NASK. All rights reserved.

import glob
import os.path as osp
import sys

from setuptools import setup, find_packages


setup_dir, setup_filename = osp.split(osp.abspath(__file__))
setup_human_readable_ref = osp.join(osp.basename(setup_dir), setup_filename)

def get_version(filename_base):
    path_base = osp.join(setup_dir, filename_base)
    path_glob_pattern = path_base + '*'
    # The non-suffixed path variant should be
    # tried only if another one does not exist.
    matching_paths = sorted(glob.iglob(path_glob_pattern),
                            reverse=True)
    try:
        path = matching_paths[0]
    except IndexError:
        sys.exit('[{}] Cannot determine the addrpool version '
                 '(no files match the pattern {!a}).'
                 .format(setup_human_readable_ref,
                         path_glob_pattern))
    try:
        with open(path, encoding='ascii') as f:
            return f.read().strip()
    except (OSError, UnicodeError) as exc:
        sys.exit('[{}] Cannot determine the addrpool version '
                 '(an error occurred when trying to '
                 'read it from the file {!a} - {}).'
                 .format(setup_human_readable_ref,
                         path,
                         exc))


def read_requirements(filename):
    requirements = []
    with open(osp.join(setup_dir, filename), encoding='ascii') as f:
        for raw_line in f:
            line = raw_line.strip()
            if not line or line.startswith('#'):
                continue
            requirements.append(line)
    return requirements


version = get_version('.addrpool-version')

requirements = read_requirements('requirements')
requirements_tests = read_requirements('requirements-tests')
requirements_dev = requirements_tests + read_requirements('requirements-dev')


setup(
    name="addrpool",
    version=version,

    packages=find_packages(include=['addrpool', 'addrpool.*']),
    install_requires=requirements,
    extras_require={
        'tests': requirements_tests,
        'dev': requirements_dev,
    },
    python_requires='>=3.11',
    include_package_data=True,
    zip_safe=False,

    description=('Pools of IP addresses, CIDR blocks and IP ranges: '
                 'parsing, overlap tests, size estimation, comparison.'),
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Affero General Public License v3',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet',
        'Topic :: Software Development :: Libraries',
    ],
    keywords='ip address pool cidr range overlap library',
)
