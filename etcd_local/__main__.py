"""Run the etcd-local command line tool with `python -m etcd_local`."""

from etcd_local.tool.etcd_local import main

if __name__ == "__main__":
    main()
