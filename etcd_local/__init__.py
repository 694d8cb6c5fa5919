"""
etcd-local generates the static pod manifest for a local etcd member.

The manifest is derived from a kubeadm style `MasterConfiguration` and is
written into the kubelet manifests directory, where the kubelet picks it up
and runs etcd outside of any scheduler.
"""

__all__ = [
    "config",
    "constants",
    "flags",
    "command",
    "pod",
    "manifest",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
