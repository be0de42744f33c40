# kindling

Building blocks for local Kubernetes clusters whose nodes are Docker
containers. The package models a cluster configuration, turns it into
`docker` command-line arguments, runs `docker` to inspect nodes and pull
images, patches YAML configuration documents, and reports progress on the
terminal.

## Installation

```
pip install .
```

The only dependency is PyYAML. Functions that talk to containers run the
`docker` client, which has to be on `PATH`.

## Modules

- `kindling.config`: the configuration model: `Cluster`, `Networking`,
  `Node` (with `deep_copy()`), `Mount`, `PortMapping`, `PatchJSON6902`, and
  the enums `NodeRole`, `MountPropagation` and `PortMappingProtocol`.
- `kindling.common`: helpers shared by providers:
  - `make_node_namer(cluster_name)` returns a function that names nodes by
    role, numbering repeated roles from 2 (`kind-worker`, `kind-worker2`).
  - `required_node_images(cfg)` returns the set of node images in a config.
  - `get_proxy_envs(cfg, getenv=None)` collects `HTTP_PROXY`, `HTTPS_PROXY`
    and `NO_PROXY` (upper or lower case) from the environment, returns them in
    both cases, and appends the service and pod subnets to `NO_PROXY` when any
    proxy is set.
  - `get_free_port(listen_addr)` binds a free TCP port and returns it;
    `port_or_get_free_port(port, listen_addr)` returns `port` if positive.
  - `API_SERVER_INTERNAL_PORT` is 6443.
- `kindling.provision`: docker run arguments:
  `generate_mount_bindings(mounts)` (`--volume=host:container[:ro,Z,rshared|rslave]`),
  `generate_port_mappings(port_mappings)` (`--publish=[addr:]port:container/PROTO`),
  `cluster_is_ipv6(cfg)`, `cluster_has_implicit_load_balancer(cfg)` (more than
  one control plane), `get_subnets(network_name)` and `get_proxy_env(cfg)`,
  which also adds the subnets of docker's `bridge` network to `NO_PROXY`.
- `kindling.dockercli`: `run(args)`, `output_lines(args)`,
  `combined_output_lines(args)` and `uses_userns_remap()`. A command that
  cannot be started or exits non-zero raises `CommandError`.
- `kindling.dockernode`: `Node(name)` is a handle for a node container;
  `Node.ip()` returns its IPv4 and IPv6 addresses, `Node.command(cmd, *args)`
  returns a `NodeCommand`, whose `docker_args()` gives the `docker exec`
  arguments (`--privileged`, `-i` when stdin is set, `-e` per env entry).
- `kindling.images`: `ensure_node_images(status, cfg, logger=None)`,
  `pull_if_not_present(image, retries, logger=None)` and
  `pull(image, retries, logger=None)`, which retries with a growing pause and
  raises the last `CommandError` if every attempt fails.
- `kindling.jsonpatch`: `merge_patch(document, patch)` (RFC 7386) and
  `apply_json_patch(document, operations)` (RFC 6902) on decoded JSON values;
  errors raise `JSONPatchError`.
- `kindling.patch`: `patch(to_patch, patches, patches_6902)` applies merge
  patches, then JSON 6902 patches, to every document of a YAML stream whose
  `kind` matches and whose `apiVersion` matches when the patch sets one.
  Output documents have sorted keys and are joined by `---` lines. Also
  `split_yaml_documents`, `parse_yaml_match_info`, `MatchInfo`,
  `group_version_to_api_version`; errors raise `PatchError`.
- `kindling.log`: the `Logger` and `InfoLogger` protocols and the silent
  `NoopLogger` / `NoopInfoLogger`.
- `kindling.logger`: `Logger(writer, verbosity)` writes whole lines to a
  text writer; `v(level)` gives an info logger enabled when
  `level <= verbosity`, and levels above 0 are prefixed with
  `DEBUG: dir/file.py:line] `.
- `kindling.spinner`: `Spinner(writer)` draws frames in a background thread
  between `start()` and `stop()` (also usable as a context manager); its
  `write()` returns the cursor to the start of the line first.
- `kindling.status`: `Status` / `status_for_logger(logger)` print
  ` • step  ...`, ` ✓ step` or ` ✗ step`, and drive the spinner instead when
  the logger writes through one.
- `kindling.term`: `is_terminal(w)`.
- `kindling.assertions`: `expect_error(t, expect_error, err)` and
  `string_equal(t, expected, result)`, which report through `t.errorf`.

## Examples

Naming nodes:

```python
from kindling.common import make_node_namer

namer = make_node_namer("kind")
namer("control-plane")  # "kind-control-plane"
namer("worker")         # "kind-worker"
namer("worker")         # "kind-worker2"
```

Patching a YAML document stream:

```python
from kindling.patch import patch

docs = "kind: ClusterConfiguration\napiVersion: kubeadm.k8s.io/v1beta2\nfoo: 1\n"
merge = ["kind: ClusterConfiguration\nfoo: 2\n"]
print(patch(docs, merge, []))
```

Logging with a status line:

```python
import sys
from kindling.logger import Logger
from kindling.status import status_for_logger

logger = Logger(sys.stderr, 0)
status = status_for_logger(logger)
status.start("Preparing nodes")
status.end(True)
```

## What it does not do

There is no command-line tool and no complete cluster provider: the package
does not create, list or delete clusters, start Kubernetes on the nodes, or
write kubeconfig files. `kindling.provision` only computes arguments and
proxy settings; running the containers is left to the caller.

## Running the tests

```
pip install ".[test]"
pytest
```