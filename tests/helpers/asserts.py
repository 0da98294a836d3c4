import os


def assert_unique_paths(infos):
    paths = [info.path for info in infos]
    assert len(paths) == len(set(paths)), f"duplicate virtual paths: {paths}"
    return paths


def assert_descriptor_shape(info):
    assert not info.path.startswith("/")
    assert "\\" not in info.path
    assert os.path.isabs(info.real_path)
