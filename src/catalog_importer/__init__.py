"""Import Helm chart repositories into a KubeSphere application catalog."""
