import io
import re
import setuptools

with io.open('src/tagbump/__init__.py', encoding='utf8') as fp:
  version = re.search(r'__version__\s*=\s*"(.*)"', fp.read()).group(1)

with io.open('README.md', encoding='utf8') as fp:
  long_description = fp.read()

requirements = ['cleo >=2.0.0,<3.0.0', 'databind >=4.4.0,<5.0.0', 'GitPython >=3.1.0,<4.0.0', 'PyYAML >=6.0,<7.0', 'requests >=2.22.0,<3.0.0']

setuptools.setup(
  name = 'tagbump',
  version = version,
  author = 'Niklas Rosenstein',
  author_email = 'rosensteinniklas@gmail.com',
  description = 'Updates the version in JSON and YAML files from a pushed Git tag and commits the change back.',
  long_description = long_description,
  long_description_content_type = 'text/markdown',
  license = 'MIT',
  packages = setuptools.find_packages('src', ['test', 'test.*', 'docs', 'docs.*']),
  package_dir = {'': 'src'},
  include_package_data = False,
  install_requires = requirements,
  extras_require = {'test': ['pytest >=7.0.0']},
  tests_require = [],
  python_requires = '>=3.10',
  data_files = [],
  entry_points = {
    'console_scripts': [
      'tagbump = tagbump.__main__:main',
    ],
  }
)
