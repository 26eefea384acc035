'''
3D unsteady panel method
date: 2 Oct 2017

Surface writers: export a panel mesh with scalar fields defined per panel.
Output is plain ASCII, readable by ParaView (VTK legacy format) or Gmsh
(MSH 2.2 format).
'''

import numpy as np


class SurfaceWriter():
	'''
	Base class. Derived classes implement file_extension and write.
	'''

	def file_extension(self):
		raise NotImplementedError('file_extension not implemented!')


	def write(self,surface,filename,node_offset,panel_offset,
		                                             view_names,view_data):
		'''
		Write surface mesh and views (one array of per-panel values for each
		name in view_names) to filename. node_offset and panel_offset are the
		numbering offsets of the surface nodes and panels in a collection of
		surfaces.
		'''
		raise NotImplementedError('write not implemented!')


	def _check(self,surface,view_names,view_data):
		if len(view_names)!=len(view_data):
			raise NameError('Number of view names and view data do not match!')
		for name,data in zip(view_names,view_data):
			if len(data)!=surface.n_panels():
				raise NameError('View %s has %d values, %d panels expected!'
					                      %(name,len(data),surface.n_panels()))



class VTKSurfaceWriter(SurfaceWriter):
	'''
	VTK legacy ASCII polydata. Views are written as cell data. Offsets are
	not required, as each file holds a single surface.
	'''

	def file_extension(self):
		return '.vtk'


	def write(self,surface,filename,node_offset,panel_offset,
		                                             view_names,view_data):

		self._check(surface,view_names,view_data)

		K=surface.n_nodes()
		M=surface.n_panels()
		Nentries=np.sum([len(pp)+1 for pp in surface.panel_nodes])

		with open(filename,'w') as f:
			f.write('# vtk DataFile Version 2.0\n')
			f.write('FileCreatedByUPM3D\n')
			f.write('ASCII\n')
			f.write('DATASET POLYDATA\n')

			f.write('POINTS %d double\n'%K)
			for nn in range(K):
				f.write('%.16e %.16e %.16e\n'%tuple(surface.nodes[nn,:]))

			f.write('POLYGONS %d %d\n'%(M,Nentries))
			for pp in range(M):
				nodes_pp=surface.panel_nodes[pp]
				f.write('%d %s\n'
					      %(len(nodes_pp),' '.join(['%d'%nn for nn in nodes_pp])))

			if M>0 and len(view_names)>0:
				f.write('CELL_DATA %d\n'%M)
				for name,data in zip(view_names,view_data):
					f.write('SCALARS %s double 1\n'%name)
					f.write('LOOKUP_TABLE default\n')
					for pp in range(M):
						f.write('%.16e\n'%data[pp])

		return filename



class GmshSurfaceWriter(SurfaceWriter):
	'''
	Gmsh MSH 2.2 ASCII format. Node and element numbers are offset, so that
	the files of all surfaces at one time-step can be merged in Gmsh.
	'''

	# element types
	_elem_type={3:2,4:3}

	def file_extension(self):
		return '.msh'


	def write(self,surface,filename,node_offset,panel_offset,
		                                             view_names,view_data):

		self._check(surface,view_names,view_data)

		K=surface.n_nodes()
		M=surface.n_panels()

		with open(filename,'w') as f:
			f.write('$MeshFormat\n2.2 0 8\n$EndMeshFormat\n')

			f.write('$Nodes\n%d\n'%K)
			for nn in range(K):
				f.write('%d %.16e %.16e %.16e\n'
					               %((node_offset+nn+1,)+tuple(surface.nodes[nn,:])))
			f.write('$EndNodes\n')

			f.write('$Elements\n%d\n'%M)
			for pp in range(M):
				nodes_pp=surface.panel_nodes[pp]
				f.write('%d %d 0 %s\n'%(panel_offset+pp+1,
					                    self._elem_type[len(nodes_pp)],
					   ' '.join(['%d'%(node_offset+nn+1) for nn in nodes_pp])))
			f.write('$EndElements\n')

			for name,data in zip(view_names,view_data):
				f.write('$ElementData\n')
				f.write('1\n"%s"\n'%name)
				f.write('1\n0.0\n')
				f.write('3\n0\n1\n%d\n'%M)
				for pp in range(M):
					f.write('%d %.16e\n'%(panel_offset+pp+1,data[pp]))
				f.write('$EndElementData\n')

		return filename
