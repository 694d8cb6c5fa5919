"""Command line tool for generating the local etcd static pod manifest."""
