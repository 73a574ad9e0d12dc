from rich.pretty import pprint

from optonaut import *

__prog__ = "optonaut-demo"


class Build(OptionHolder):
    output_dir = option(help="where artifacts go").default("dist")
    jobs = option("-j", "--jobs", envvar="BUILD_JOBS").integer().default(1).check(lambda value: value > 0)
    tags = option("-t", "--tag").multiple()
    legacy = option().deprecated("--legacy has no effect anymore")


if __name__ == '__main__':
    build = Build()
    pprint(Build.__options__)
    pprint(build.parse({
        "-j": [Invocation("-j", ["4"])],
        "--tag": [Invocation("-t", ["fast"]), Invocation("--tag", ["nightly"])],
    }, Context(__prog__, shell=True, colorful=True, sources=[TomlValueSource.from_file("build.toml", root="tool.build")])))
