"""Fixed names and paths shared by the etcd flag defaults and the pod spec.

Certificate paths are defined once here so that the values passed to etcd on
the command line always point inside the certificate volume mounted into the
container.
"""

import posixpath

# Name of the etcd container, pod and the static pod manifest file.
ETCD = "etcd"

KUBERNETES_DIR = "/etc/kubernetes"
MANIFESTS_SUB_DIR_NAME = "manifests"
DEFAULT_MANIFESTS_DIR = posixpath.join(KUBERNETES_DIR, MANIFESTS_SUB_DIR_NAME)
MANIFEST_SUFFIX = ".yaml"

SYSTEM_NAMESPACE = "kube-system"
CONTROL_PLANE_TIER = "control-plane"
CRITICAL_POD_ANNOTATION = "scheduler.alpha.kubernetes.io/critical-pod"

DEFAULT_IMAGE_REPOSITORY = "k8s.gcr.io"
DEFAULT_CLIENT_URL = "https://127.0.0.1:2379"
DEFAULT_SNAPSHOT_COUNT = "10000"

ETCD_CERTS_DIR = posixpath.join(KUBERNETES_DIR, "pki", ETCD)
ETCD_CA_CERT_NAME = "ca.crt"
ETCD_SERVER_CERT_NAME = "server.crt"
ETCD_SERVER_KEY_NAME = "server.key"
ETCD_PEER_CERT_NAME = "peer.crt"
ETCD_PEER_KEY_NAME = "peer.key"

ETCD_DATA_VOLUME_NAME = ETCD
ETCD_CERTS_VOLUME_NAME = "etcd-certs"


def cert_path(name: str) -> str:
    """Return the path of a certificate file inside the etcd certificates dir."""
    return posixpath.join(ETCD_CERTS_DIR, name)
