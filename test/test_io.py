'''
@date: 5 Oct 2017
@brief: tests for output: surface writers, solver log and h5 snapshots
'''
import os, sys
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)),'..'))

import shutil
import tempfile
import numpy  as np

import upm3d_dyn as upm
import geo
import writers
import read
import save
from body import Body
from parameters import Parameters

import unittest



class Test_io(unittest.TestCase):
	'''
	Each method defined in this class contains a test case.
	@warning: by default, only functions whose name starts with 'test' is run.
	'''

	def setUp(self):
		''' Common piece of code to initialise the test '''

		self.TOL_zero=1e-14
		self.savedir=tempfile.mkdtemp()


	def tearDown(self):
		shutil.rmtree(self.savedir)


	def build_solver(self):
		S=upm.Solver(log_folder=os.path.join(self.savedir,'log'),
			                           par=Parameters(convect_wake=False))
		S._verbose=False
		Bs=Body('sphere')
		Bs.add_non_lifting_surface(geo.build_sphere(0.5,4,6,centre=(0.,5.,0.)))
		Bw=Body('wing')
		Bw.add_lifting_surface(geo.build_wing(1.,4.,4,2,alpha=.05))
		S.add_body(Bs)
		S.add_body(Bw)
		S.set_freestream_velocity([1.,0.,0.])
		S.set_fluid_density(1.)
		S.initialize_wakes(0.1)
		return S, Bs, Bw


	def test_vtk_writer(self):
		P=geo.build_flat_plate(2.,1.,2,1)
		filename=os.path.join(self.savedir,'plate.vtk')
		W=writers.VTKSurfaceWriter()
		self.assertEqual(W.file_extension(),'.vtk')
		W.write(P,filename,0,0,['Cp','mu'],[np.array([.5,-.5]),np.zeros((2,))])

		with open(filename,'r') as f:
			lines=f.read().splitlines()
		self.assertEqual(lines[0],'# vtk DataFile Version 2.0')
		self.assertEqual(lines[3],'DATASET POLYDATA')
		self.assertEqual(lines[4],'POINTS 6 double')
		self.assertIn('POLYGONS 2 10',lines)
		self.assertIn('4 0 1 4 3',lines)
		self.assertIn('CELL_DATA 2',lines)
		self.assertIn('SCALARS Cp double 1',lines)
		self.assertIn('SCALARS mu double 1',lines)
		nn=lines.index('SCALARS Cp double 1')
		self.assertEqual(float(lines[nn+2]),.5)
		self.assertEqual(float(lines[nn+3]),-.5)


	def test_gmsh_writer(self):
		P=geo.build_flat_plate(2.,1.,2,1)
		filename=os.path.join(self.savedir,'plate.msh')
		W=writers.GmshSurfaceWriter()
		self.assertEqual(W.file_extension(),'.msh')
		W.write(P,filename,10,20,['Cp'],[np.array([.5,-.5])])

		with open(filename,'r') as f:
			lines=f.read().splitlines()
		self.assertEqual(lines[:3],['$MeshFormat','2.2 0 8','$EndMeshFormat'])
		nn=lines.index('$Nodes')
		self.assertEqual(lines[nn+1],'6')
		self.assertEqual(lines[nn+2].split()[0],'11')
		nn=lines.index('$Elements')
		self.assertEqual(lines[nn+1],'2')
		self.assertEqual(lines[nn+2],'21 3 0 11 12 15 14')
		nn=lines.index('$ElementData')
		self.assertEqual(lines[nn+2],'"Cp"')
		self.assertEqual(lines[nn+9].split()[0],'21')
		self.assertEqual(float(lines[nn+10].split()[1]),-.5)


	def test_writer_mismatch(self):
		P=geo.build_flat_plate(1.,1.,2,2)
		with self.assertRaises(NameError):
			writers.VTKSurfaceWriter().write(P,
				 os.path.join(self.savedir,'bad.vtk'),0,0,['Cp'],[np.zeros((3,))])


	def test_log(self):
		''' Log folder tree, one file per surface and time-step '''

		S,Bs,Bw=self.build_solver()
		self.assertTrue(S.solve())

		for W in [writers.VTKSurfaceWriter(),writers.GmshSurfaceWriter()]:
			S.log(3,W)
			ext=W.file_extension()
			for sub in [('sphere','non_lifting_surface_0'),
			            ('wing','lifting_surface_0'),
			            ('wing','wake_0')]:
				filename=os.path.join(S.log_folder,sub[0],sub[1],'step_3'+ext)
				self.assertTrue(os.path.isfile(filename),msg=filename)

		# wake file only carries the doublet distribution
		with open(os.path.join(S.log_folder,'wing','wake_0','step_3.vtk')) as f:
			txt=f.read()
		self.assertIn('DoubletDistribution',txt)
		self.assertNotIn('PressureDistribution',txt)

		# gmsh offsets: wing numbering follows the sphere
		Msph=Bs.non_lifting_surfaces[0].surface.n_panels()
		with open(os.path.join(S.log_folder,'wing','lifting_surface_0',
			                                               'step_3.msh')) as f:
			lines=f.read().splitlines()
		nn=lines.index('$Elements')
		self.assertEqual(int(lines[nn+2].split()[0]),Msph+1)


	def test_save(self):
		''' h5 snapshot of solver state and time histories '''

		S,Bs,Bw=self.build_solver()
		self.assertTrue(S.solve_dyn(0.3,0.1))
		S.save(self.savedir,'snapshot.h5')

		H=read.h5file(os.path.join(self.savedir,'snapshot.h5'))
		self.assertTrue(np.array_equal(H.solution.doublet_coefficients,
			                                           S.doublet_coefficients))
		self.assertTrue(np.array_equal(H.solution.pressure_coefficients,
			                                          S.pressure_coefficients))
		self.assertEqual(H.solution.n_non_wake_panels,S.n_non_wake_panels)
		self.assertTrue(np.array_equal(H.wake_00.nodes,
			                             Bw.lifting_surfaces[0].wake.nodes))
		self.assertTrue(np.array_equal(H.dynamics.THforce,S.THforce))
		self.assertTrue(np.array_equal(H.dynamics.time,S.time))

		# arrays are stored in double precision
		self.assertEqual(H.solution.doublet_coefficients.dtype,np.float64)
		self.assertEqual(H.wake_00.nodes.dtype,np.float64)

		# partial reading
		H=read.h5file(os.path.join(self.savedir,'snapshot.h5'),
			                                          ['dynamics/THmoment'])
		self.assertTrue(np.array_equal(H.dynamics.THmoment,S.THmoment))
		self.assertFalse(hasattr(H,'solution'))


	def test_save_unsupported(self):
		''' Attributes with no HDF5 equivalent are skipped with a warning '''

		Out=save.Output('case').drop(x=np.linspace(0.,1.,7),opts={'a':1},
			                                                        note=None)
		with self.assertWarns(UserWarning):
			save.h5file(self.savedir,'case.h5',Out)

		H=read.h5file(os.path.join(self.savedir,'case.h5'))
		self.assertTrue(np.array_equal(H.case.x,np.linspace(0.,1.,7)))
		self.assertFalse(hasattr(H.case,'opts'))
		self.assertFalse(hasattr(H.case,'note'))



if __name__=='__main__':

	unittest.main()
