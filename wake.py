'''
3D unsteady panel method
date: 2 Oct 2017

Wake of a lifting surface. The wake is an append-only sequence of panel
rows: node rows are stored from the oldest (furthest downstream) to the newest
(attached to the trailing edge), and panel row k joins node rows k and k+1.

Nodes and doublet coefficients live in buffers whose capacity is doubled when
full; self.nodes and self.doublet_coefficients are views over the filled part
of the buffers, so that in-place updates act on the wake itself.
'''

import numpy as np

from surface import Surface


class Wake(Surface):

	def __init__(self,lifting_surface):

		super().__init__()
		self.lifting_surface=lifting_surface

		Ns=lifting_surface.n_spanwise_nodes()
		self._node_buf=np.zeros((4*Ns,3))
		self._mu_buf=np.zeros((4*(Ns-1),))
		self.nodes=self._node_buf[:0]
		self.doublet_coefficients=self._mu_buf[:0]

		# age of each panel row [s]
		self.row_age=[]


	def n_rows(self):
		''' Number of panel rows '''
		return len(self.panel_nodes)//self.lifting_surface.n_spanwise_panels()


	def _grow(self,Kw,Mw):
		''' Make room for Kw nodes and Mw panels, keeping stored values '''

		if Kw>self._node_buf.shape[0]:
			buf=np.zeros((max(Kw,2*self._node_buf.shape[0]),3))
			buf[:self.nodes.shape[0]]=self.nodes
			self._node_buf=buf
		if Mw>self._mu_buf.shape[0]:
			buf=np.zeros((max(Mw,2*self._mu_buf.shape[0]),))
			buf[:self.doublet_coefficients.shape[0]]=self.doublet_coefficients
			self._mu_buf=buf


	def add_layer(self):
		'''
		Append a row of nodes at the trailing edge. If a previous row exists,
		a row of panels joining the two is also added, with zero doublet
		coefficient. Geometry is recomputed.
		'''

		ls=self.lifting_surface
		Ns=ls.n_spanwise_nodes()
		K0=self.n_nodes()
		M0=self.n_panels()
		new_panels=[]
		if K0>=Ns:
			for kk in range(1,Ns):
				node=K0+kk
				new_panels.append([node-1, node-1-Ns, node-Ns, node])

		Kw=K0+Ns
		Mw=M0+len(new_panels)
		self._grow(Kw,Mw)
		for kk in range(Ns):
			self._node_buf[K0+kk,:]=ls.nodes[ls.trailing_edge_node(kk),:]
		self._mu_buf[M0:Mw]=0.0

		self.nodes=self._node_buf[:Kw]
		self.doublet_coefficients=self._mu_buf[:Mw]
		self.panel_nodes+=new_panels
		if len(new_panels)>0:
			self.row_age.append(0.0)

		self.compute_geometry()


	def translate_trailing_edge(self):
		'''
		Attach the newest node row to the current trailing edge position, e.g.
		after the body has moved.
		'''

		ls=self.lifting_surface
		Ns=ls.n_spanwise_nodes()
		if self.n_nodes()<Ns:
			return
		K0=self.n_nodes()-Ns
		for kk in range(Ns):
			self.nodes[K0+kk,:]=ls.nodes[ls.trailing_edge_node(kk),:]
		self.compute_geometry()


	def update_properties(self,dt):
		''' Advance the age of each wake row '''

		for rr in range(len(self.row_age)):
			self.row_age[rr]+=dt


	def compute_topology(self):
		''' Surface gradients are not required over the wake '''
		self.panel_neighbours=[[] for pp in range(self.n_panels())]
