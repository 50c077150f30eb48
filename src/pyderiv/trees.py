#!/usr/bin/env python

"""Drawing parse witnesses"""

import graphviz

from pyderiv._private import util


def draw_witness(witness, style='tree'):
    """
    Draws a parse witness as a tree with graphviz.
    :param witness: A witness as returned by `parse`; tuples are inner nodes, anything else is a leaf
    :param style: The style to render the tree in. Choose from 'tree', 'boxes'.
    :return: A `graphviz.Graph` object.
    """
    util.require_graphviz()
    if style not in ('tree', 'boxes'):
        raise ValueError(f"Unknown style {style!r}, choose from 'tree', 'boxes'")

    graph = graphviz.Graph(comment=repr(witness))
    all_nodes = []
    use_clusters = style == 'boxes'
    hide_box_attrs = {'peripheries': '0', 'margin': '2'}

    def add_subtree(graph, subtree) -> str:
        """Adds `subtree` below the current graph and returns the id of its root."""
        node_id = str(len(all_nodes))
        all_nodes.append(subtree)
        if not isinstance(subtree, tuple) or subtree == ():
            graph.node(node_id, util.symbol_label(subtree), shape='plain')
            return node_id

        with graph.subgraph(name=("cluster_" if use_clusters else "") + node_id,
                            graph_attr=hide_box_attrs if style == 'tree' else {}) as subgraph:
            # Inner nodes are unlabeled; the tree shape carries the pairing
            subgraph.node(node_id, '', shape='point', group=node_id)
            children = [add_subtree(subgraph, child) for child in subtree]
            for child in children:
                subgraph.edge(node_id, child)
        return node_id

    add_subtree(graph, witness)
    graph.attr(ranksep='0.3', splines='false')
    if style == 'boxes':
        graph.edge_attr['style'] = 'invis'
    return graph
