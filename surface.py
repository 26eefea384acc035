'''
3D unsteady panel method
date: 2 Oct 2017

Surface meshes of planar panels (triangles or quadrilaterals). A Surface
stores:
- nodes (K,3) and the connectivity panel_nodes (list of node indices lists,
  anticlockwise about the outward normal);
- per-panel geometry: collocation points Cmat (M,3), normals Nmat (M,3),
  areas Amat (M,);
- panel neighbours, used to compute surface gradients of panel fields.

A LiftingSurface adds the trailing edge topology required by the Kutta
condition.
'''

import itertools
import numpy as np

import infl3d

_surface_id=itertools.count()


class Surface():
	'''
	Panel mesh with source/doublet influence kernels.
	'''

	def __init__(self,nodes=None,panel_nodes=None):

		self.id=next(_surface_id)

		self.nodes=np.zeros((0,3))
		self.panel_nodes=[]

		# per-panel geometry
		self.Cmat=np.zeros((0,3))
		self.Nmat=np.zeros((0,3))
		self.Amat=np.zeros((0,))
		self._verts=[]  # vertices projected on panel plane
		self._size=np.zeros((0,))
		self.panel_neighbours=[]

		if nodes is not None:
			self.set_mesh(nodes,panel_nodes)


	def set_mesh(self,nodes,panel_nodes):
		''' Define nodes and connectivity, then build topology and geometry '''

		nodes=np.array(nodes,dtype=float)
		if nodes.ndim!=2 or nodes.shape[1]!=3:
			raise ValueError('nodes must be a (K,3) array!')
		for pp in panel_nodes:
			if len(pp) not in (3,4):
				raise ValueError('Only triangles and quadrilaterals supported!')

		self.nodes=nodes
		self.panel_nodes=[list(pp) for pp in panel_nodes]
		self.compute_topology()
		self.compute_geometry()

		return self


	def n_nodes(self):
		return self.nodes.shape[0]


	def n_panels(self):
		return len(self.panel_nodes)


	def compute_topology(self):
		'''
		Find neighbours of each panel, i.e. panels sharing an edge.
		'''

		edges={}
		for pp,nodes_pp in enumerate(self.panel_nodes):
			Nv=len(nodes_pp)
			for kk in range(Nv):
				key=tuple(sorted((nodes_pp[kk],nodes_pp[(kk+1)%Nv])))
				edges.setdefault(key,[]).append(pp)

		self.panel_neighbours=[[] for pp in range(self.n_panels())]
		for key in edges:
			for pp in edges[key]:
				for qq in edges[key]:
					if qq!=pp and qq not in self.panel_neighbours[pp]:
						self.panel_neighbours[pp].append(qq)


	def compute_geometry(self):
		'''
		Compute collocation points, normals and areas. Normals and areas follow
		from Newell's method, so that slightly warped quadrilaterals are
		treated as their projection over the mean plane.
		'''

		M=self.n_panels()
		self.Cmat=np.zeros((M,3))
		self.Nmat=np.zeros((M,3))
		self.Amat=np.zeros((M,))
		self._size=np.zeros((M,))
		self._verts=[]

		for pp in range(M):
			V=self.nodes[self.panel_nodes[pp],:]
			cc=V.mean(0)
			Avec=0.5*np.cross(V,np.roll(V,-1,axis=0)).sum(0)
			area=np.linalg.norm(Avec)
			self.Cmat[pp,:]=cc
			self.Amat[pp]=area
			if area>0.:
				nv=Avec/area
			else:
				nv=np.zeros((3,))
			self.Nmat[pp,:]=nv
			# project vertices on plane through collocation point
			Vp=V-np.outer(np.dot(V-cc,nv),nv)
			self._verts.append(Vp)
			self._size[pp]=np.max(np.linalg.norm(Vp-cc,axis=1))


	def panel_collocation_point(self,panel,below_surface=False,delta=1e-12):
		'''
		Collocation point of the panel. If below_surface is True, the point is
		shifted by delta along the inward normal.
		'''

		if below_surface:
			return self.Cmat[panel,:]-delta*self.Nmat[panel,:]
		return self.Cmat[panel,:]


	def collocation_points(self,below_surface=False,delta=1e-12):
		if below_surface:
			return self.Cmat-delta*self.Nmat
		return self.Cmat.copy()


	def panel_normal(self,panel):
		return self.Nmat[panel,:]


	def panel_surface_area(self,panel):
		return self.Amat[panel]


	# --------------------------------------------------------------- kernels

	def source_and_doublet_influence(self,x,panel):
		'''
		Potential induced at x by a unit source and a unit doublet on panel.
		x can be a point (3,) or an array of points (N,3).
		'''

		X,single=infl3d._as_points(x)
		verts=self._verts[panel]
		Omega=infl3d.solid_angle(X,verts,self.Nmat[panel],self.Cmat[panel],
															self._size[panel])
		src=infl3d.source_potential(X,verts,self.Nmat[panel],self.Cmat[panel],
																		Omega)
		dbl=-infl3d.fact4pi*Omega

		if single:
			return src[0], dbl[0]
		return src, dbl


	def doublet_influence(self,x,panel):
		''' Potential induced at x by a unit doublet on panel '''

		X,single=infl3d._as_points(x)
		Omega=infl3d.solid_angle(X,self._verts[panel],self.Nmat[panel],
										  self.Cmat[panel],self._size[panel])
		dbl=-infl3d.fact4pi*Omega

		if single:
			return dbl[0]
		return dbl


	def source_unit_velocity(self,x,panel):
		''' Velocity induced at x by a unit source on panel '''

		X,single=infl3d._as_points(x)
		verts=self._verts[panel]
		Omega=infl3d.solid_angle(X,verts,self.Nmat[panel],self.Cmat[panel],
															self._size[panel])
		V=infl3d.source_velocity(X,verts,self.Nmat[panel],Omega)

		if single:
			return V[0]
		return V


	def vortex_ring_unit_velocity(self,x,panel):
		'''
		Velocity induced at x by a unit doublet on panel, computed through the
		equivalent vortex ring along the panel nodes.
		'''

		X,single=infl3d._as_points(x)
		V=infl3d.vortex_ring_velocity(X,self.nodes[self.panel_nodes[panel],:])

		if single:
			return V[0]
		return V


	def scalar_field_gradient(self,scalar_field,offset,panel):
		'''
		Surface gradient at panel of a field defined at panel collocation
		points. The field of this surface is scalar_field[offset:offset+M].
		The gradient is the least squares fit over the panel neighbours, in
		the tangent plane.
		'''

		nbs=self.panel_neighbours[panel]
		if len(nbs)==0:
			return np.zeros((3,))

		nv=self.Nmat[panel,:]
		dX=self.Cmat[nbs,:]-self.Cmat[panel,:]
		dX=dX-np.outer(np.dot(dX,nv),nv)
		df=np.asarray(scalar_field)[offset+np.array(nbs)]-\
											   scalar_field[offset+panel]
		grad=np.linalg.lstsq(dX,df,rcond=None)[0]

		return grad-np.dot(grad,nv)*nv


	# ------------------------------------------------------------- transform

	def translate(self,dx):
		self.nodes+=np.asarray(dx,dtype=float)
		self.compute_geometry()


	def rotate(self,Rot,origin):
		''' Rotate nodes with rotation matrix Rot about origin '''

		origin=np.asarray(origin,dtype=float)
		self.nodes[:,:]=np.dot(self.nodes-origin,Rot.T)+origin
		self.compute_geometry()



class LiftingSurface(Surface):
	'''
	Closed wing surface meshed as a structured grid: each spanwise station is
	a ring of Nc nodes starting at the trailing edge, running along the lower
	surface to the leading edge and back along the upper surface. Panel (i,j)
	joins ring nodes i,i+1 of stations j,j+1.

	The trailing edge nodes are ordered such that, with the wake trailing
	downstream, the wake panel normals point towards the upper surface.
	'''

	def __init__(self,nodes,Nc,Ns):

		self.Nc=Nc  # nodes per section
		self.Ns=Ns  # spanwise stations
		panel_nodes=[]
		for jj in range(Ns-1):
			for ii in range(Nc):
				i2=(ii+1)%Nc
				panel_nodes.append([jj*Nc+ii, jj*Nc+i2,
											  (jj+1)*Nc+i2, (jj+1)*Nc+ii])

		super().__init__(nodes,panel_nodes)


	def n_chordwise_nodes(self):
		return self.Nc


	def n_chordwise_panels(self):
		return self.Nc


	def n_spanwise_nodes(self):
		return self.Ns


	def n_spanwise_panels(self):
		return self.Ns-1


	def trailing_edge_node(self,index):
		return index*self.Nc


	def trailing_edge_upper_panel(self,index):
		return index*self.Nc+self.Nc-1


	def trailing_edge_lower_panel(self,index):
		return index*self.Nc


	def compute_topology(self):
		'''
		As per Surface, but upper and lower trailing edge panels are not
		neighbours: the doublet field jumps across the trailing edge.
		'''

		super().compute_topology()
		for jj in range(self.n_spanwise_panels()):
			pu=self.trailing_edge_upper_panel(jj)
			pl=self.trailing_edge_lower_panel(jj)
			if pl in self.panel_neighbours[pu]:
				self.panel_neighbours[pu].remove(pl)
			if pu in self.panel_neighbours[pl]:
				self.panel_neighbours[pl].remove(pu)


	def trailing_edge_bisector(self,index):
		'''
		Unit vector bisecting the trailing edge angle at the index-th spanwise
		station, pointing downstream.
		'''

		Nc=self.Nc
		te=self.nodes[index*Nc,:]
		up=te-self.nodes[index*Nc+Nc-1,:]
		lo=te-self.nodes[index*Nc+1,:]
		bis=up/np.linalg.norm(up)+lo/np.linalg.norm(lo)

		return bis/np.linalg.norm(bis)
