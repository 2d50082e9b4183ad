from setuptools import setup, find_packages


def main():
    packages = find_packages(exclude=['tests'])
    print("Installing `bref-cli` packages:\n", '\n'.join(packages))
    extras_require = {'test': ['moto>=5', 'pytest']}
    extras_require['all'] = list({dep for deps in extras_require.values()
                                  for dep in deps})
    setup(name='bref_cli',
          version='0.0.1',
          description='Bref CLI',
          long_description='A command line tool for running console commands '
                           'in, and invoking, serverless PHP functions '
                           'deployed on AWS Lambda.',
          url='https://github.com/brefphp/bref',
          packages=packages,
          py_modules=['cli'],
          include_package_data=True,
          install_requires=['boto3', 'click>=8.2', 'ruamel.yaml'],
          extras_require=extras_require,
          entry_points="""
          [console_scripts]
          bref=cli:bref
          """)


if __name__ == '__main__':
    main()
